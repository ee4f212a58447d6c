from typing import Any
from fastapi import APIRouter, Depends
from newsdesk.dependencies import get_store
from newsdesk.models import ArticlePublic, Channel
from newsdesk.news import ALL_CHANNELS, ArticleStore, query

router = APIRouter(prefix="/news", tags=["News"])

@router.get("/channels", response_model=list[Channel])
def read_channels(store: ArticleStore = Depends(get_store)) -> Any:
    """
    Retrieve the list of news channels.
    """
    return list(store.channels)

@router.get("/articles", response_model=list[ArticlePublic])
def read_articles(channel: str = ALL_CHANNELS, q: str = '', store: ArticleStore = Depends(get_store)) -> Any:
    """
    Retrieve articles for a channel (or "all"), filtered by a search query,
    newest first, with matches highlighted.
    """
    return query(store, channel, q)
