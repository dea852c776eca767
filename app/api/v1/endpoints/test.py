from fastapi import APIRouter

router = APIRouter()


@router.get("/test/ping", summary="Ping")
def ping():
	return {"pong": True}
