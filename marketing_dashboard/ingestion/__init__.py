from .loader import DatasetLoader, is_url

__all__ = ["DatasetLoader", "is_url"]
