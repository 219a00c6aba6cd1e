import logging

from fastapi import FastAPI
from ecjws.config import LOG_LEVEL
from ecjws.routes import base_routes, verify_routes

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI()

app.include_router(base_routes.router)
app.include_router(verify_routes.router)
