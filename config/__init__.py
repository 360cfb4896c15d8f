from .env import env, environment

__all__ = ["env", "environment"]
