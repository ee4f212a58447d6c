from fastapi import APIRouter

from newsdesk.routers import news, transcribe

api_router = APIRouter()
api_router.include_router(news.router)
api_router.include_router(transcribe.router)

@api_router.get("/", tags=["Health Check"])
def read_root():
    return "Newsdesk API. Visit /docs to view the schema."
