from fastapi import APIRouter

from ecjws.services.algorithms import ALGORITHMS

# Create a router instance
router = APIRouter()

# Define a simple GET route at the root
@router.get("/")
def root():
    return {"message": "Welcome to the EC JWS Verification Service!"}

@router.get("/algorithms")
def get_algorithms():
    """Lists the supported JWS algorithms with their curve, hash and signature size."""
    return {
        "algorithms": [
            {
                "alg": alg.name,
                "crv": alg.curve_name,
                "hash": alg.new_hash().name,
                "signature_length": alg.signature_length,
            }
            for alg in ALGORITHMS.values()
        ]
    }
