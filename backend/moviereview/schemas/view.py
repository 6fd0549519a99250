from pydantic import BaseModel, Field
from typing import List, Optional

from moviereview.core.enums import StatusType, Theme

# Declarative view descriptions produced by moviereview.ui.render
class MovieCardView(BaseModel):
    movie_id: int
    title: str
    poster_url: str = ""
    poster_alt: str = "Poster"
    meta: str = ""
    rating_badge: str = "—"
    in_watchlist: bool = False

class GridView(BaseModel):
    cards: List[MovieCardView] = Field(default_factory=list)
    empty_message: Optional[str] = None

class PaginationView(BaseModel):
    label: str = "Page 1 of 1"
    prev_disabled: bool = True
    next_disabled: bool = True

class GenreChipView(BaseModel):
    genre_id: str
    label: str
    pressed: bool = False

class StarView(BaseModel):
    value: int
    filled: bool = False
    label: str = ""

class PersonCardView(BaseModel):
    name: str
    role: str = ""
    image_url: str = ""

class SimilarCardView(BaseModel):
    movie_id: int
    title: str
    poster_url: str = ""

class TrailerView(BaseModel):
    key: str
    embed_url: str
    title: str = "YouTube trailer"

class ModalView(BaseModel):
    movie_id: int
    title: str
    poster_url: str = ""
    subtitle: str = ""
    tagline: Optional[str] = None
    overview: str = ""
    genres: List[str] = Field(default_factory=list)
    trailer: Optional[TrailerView] = None
    cast: List[PersonCardView] = Field(default_factory=list)
    crew: List[PersonCardView] = Field(default_factory=list)
    stars: List[StarView] = Field(default_factory=list)
    review_text: str = ""
    similar: List[SimilarCardView] = Field(default_factory=list)

class DrawerView(BaseModel):
    """Filters panel: off-canvas drawer on narrow viewports, inline panel otherwise"""
    off_canvas: bool = False
    open: bool = False
    collapsed: bool = True
    backdrop_hidden: bool = True

class StatusView(BaseModel):
    message: str = ""
    type: StatusType = StatusType.INFO

class DocumentView(BaseModel):
    """Whole-screen snapshot of the view context"""
    theme: Theme = Theme.DARK
    status: StatusView = Field(default_factory=StatusView)
    loader_visible: bool = False
    search: str = ""
    sort: str = "popularity.desc"
    genres: List[GenreChipView] = Field(default_factory=list)
    grid: GridView = Field(default_factory=GridView)
    pagination: PaginationView = Field(default_factory=PaginationView)
    drawer: DrawerView = Field(default_factory=DrawerView)
    menu_expanded: bool = False
    modal: Optional[ModalView] = None
