from .movie_service import MovieService, apply_client_sort

__all__ = ['MovieService', 'apply_client_sort']
