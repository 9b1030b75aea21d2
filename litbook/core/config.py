import os
from dotenv import dotenv_values, find_dotenv

_DOTENV = find_dotenv(usecwd=True)
ENV = dotenv_values(_DOTENV) if _DOTENV else {}

def get(key: str, default=None):
    value = os.environ.get(key)
    if value is not None:
        return value
    value = ENV.get(key)
    return default if value is None else value
