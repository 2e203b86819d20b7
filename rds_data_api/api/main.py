from fastapi import APIRouter

from rds_data_api.api.routes import statements, utils

api_router = APIRouter()
api_router.include_router(statements.router)
api_router.include_router(utils.router)
