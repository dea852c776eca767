import logging

from fastapi import FastAPI
from app.clients.sheetdb import SheetDBClient

from app.core.config import settings
from app.api.v1.router import api_v1_router

logging.basicConfig(
	level=settings.log_level.upper(),
	format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

app = FastAPI(title=settings.app_name, debug=settings.debug)

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/")
def read_root():
	return {"message": "Hello from app.main"}


@app.on_event("startup")
def startup() -> None:
	app.state.sheetdb = SheetDBClient()


@app.on_event("shutdown")
async def shutdown() -> None:
	await app.state.sheetdb.aclose()
