# quizblog/content/models.py
import datetime as dt
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    picture: Optional[str] = None


class OgImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    excerpt: str = ""
    date: Optional[Union[dt.date, str]] = None
    author: Optional[Author] = None
    content: str = ""
    ogImage: Optional[OgImage] = None
    links: List[str] = []


class BacklinkSummary(BaseModel):
    title: str
    excerpt: str = ""
