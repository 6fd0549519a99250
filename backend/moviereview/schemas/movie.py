from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

# TMDB Response Schemas
class TMDBModel(BaseModel):
    """Upstream payloads carry many fields we never read"""
    model_config = ConfigDict(extra="ignore")

class Genre(TMDBModel):
    id: int
    name: Optional[str] = None

class MovieSummary(TMDBModel):
    """TMDB movie list item"""
    id: int
    title: Optional[str] = None
    name: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    popularity: Optional[float] = None
    revenue: Optional[float] = None
    genre_ids: List[int] = Field(default_factory=list)

class MovieDetails(MovieSummary):
    """TMDB movie detail payload"""
    runtime: Optional[int] = None
    tagline: Optional[str] = None
    genres: List[Genre] = Field(default_factory=list)

class CastMember(TMDBModel):
    name: Optional[str] = None
    character: Optional[str] = None
    profile_path: Optional[str] = None

class CrewMember(TMDBModel):
    name: Optional[str] = None
    job: Optional[str] = None
    profile_path: Optional[str] = None

class Credits(TMDBModel):
    cast: List[CastMember] = Field(default_factory=list)
    crew: List[CrewMember] = Field(default_factory=list)

class Video(TMDBModel):
    key: Optional[str] = None
    site: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None

class MoviePage(BaseModel):
    """Normalized page of list results"""
    movies: List[MovieSummary] = Field(default_factory=list)
    total_pages: int = 1
    total_results: int = 0

class MovieDetailBundle(BaseModel):
    """Everything the detail modal shows for one movie"""
    details: Optional[MovieDetails] = None
    videos: List[Video] = Field(default_factory=list)
    credits: Credits = Field(default_factory=Credits)
    similar: List[MovieSummary] = Field(default_factory=list)

# Local state
class Review(BaseModel):
    """Saved user review; rating 0 means no star was picked"""
    rating: int = Field(0, ge=0, le=5)
    text: str = ""
