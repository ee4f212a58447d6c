import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple
from newsdesk.models import Article, ArticlePublic, Channel, Segment

logger = logging.getLogger(__name__)

ALL_CHANNELS = "all"
UNKNOWN_CHANNEL = "Unknown source"
SNIPPET_LENGTH = 100


class ArticleStore:
    """
    Read-only, ordered collection of articles and the channels they belong to.
    """

    def __init__(self, channels: Iterable[Channel], articles: Iterable[Article]):
        self.channels: Tuple[Channel, ...] = tuple(channels)
        self.articles: Tuple[Article, ...] = tuple(articles)
        ids = [a.id for a in self.articles]
        if len(ids) != len(set(ids)):
            raise ValueError("Article ids must be unique")
        self._names = {c.id: c.name for c in self.channels}

    def channel_name(self, channel_id: str) -> str:
        return self._names.get(channel_id, UNKNOWN_CHANNEL)

    def __len__(self) -> int:
        return len(self.articles)


def load_store(path: Path) -> ArticleStore:
    """
    Load the news dataset from a JSON document of the form
    ``{"channels": [...], "articles": [...]}``.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    store = ArticleStore(
        channels=[Channel.model_validate(c) for c in data.get("channels", [])],
        articles=[Article.model_validate(a) for a in data.get("articles", [])],
    )
    logger.info("Loaded %d article(s) from %d channel(s) at %s", len(store), len(store.channels), path)
    return store


def _pattern(search_text: str) -> Optional[re.Pattern]:
    if not search_text:
        return None
    return re.compile(re.escape(search_text), re.IGNORECASE)


def highlight(text: str, search_text: str) -> List[Segment]:
    """
    Split text into segments, marking every case-insensitive occurrence of
    search_text as highlighted. Joining the segments gives back the text.
    """
    pattern = _pattern(search_text)
    if pattern is None:
        return [Segment(text=text)] if text else []

    segments = []
    pos = 0
    for match in pattern.finditer(text):
        if match.start() > pos:
            segments.append(Segment(text=text[pos:match.start()]))
        segments.append(Segment(text=match.group(0), highlighted=True))
        pos = match.end()
    if pos < len(text):
        segments.append(Segment(text=text[pos:]))
    return segments


def snippet(content: str, length: int = SNIPPET_LENGTH) -> str:
    return content[:length] + "..."


def filter_articles(store: ArticleStore, channel_filter: str = ALL_CHANNELS, search_text: str = "") -> List[Article]:
    """Filter by channel and text, newest first. Ties keep dataset order."""
    # Whitespace-only queries match every article
    pattern = _pattern(search_text) if search_text.strip() else None
    selected = [
        a for a in store.articles
        if (channel_filter == ALL_CHANNELS or a.channel_id == channel_filter)
        and (pattern is None or pattern.search(a.title) or pattern.search(a.content))
    ]
    # sorted() is stable, including with reverse=True
    return sorted(selected, key=lambda a: a.date, reverse=True)


def query(store: ArticleStore, channel_filter: str = ALL_CHANNELS, search_text: str = "") -> List[ArticlePublic]:
    """
    Produce the annotated news view for a channel filter and a search query.
    """
    return [
        ArticlePublic(
            article=article,
            channel_name=store.channel_name(article.channel_id),
            title_segments=highlight(article.title, search_text),
            snippet_segments=highlight(snippet(article.content), search_text),
        )
        for article in filter_articles(store, channel_filter, search_text)
    ]
