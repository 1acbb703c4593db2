from .detail import DetailScreen
from .home import HomeScreen
from .search import SearchScreen
from .settings import SettingsScreen

__all__ = [
    "DetailScreen",
    "HomeScreen",
    "SearchScreen",
    "SettingsScreen",
]
