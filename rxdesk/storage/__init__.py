from .json_collection import JsonCollection

__all__ = ["JsonCollection"]
