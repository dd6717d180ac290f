"""Our Anime List - shared anime release tracker"""
from ouranimelist.constants import BUILD_VERSION

__version__ = BUILD_VERSION
