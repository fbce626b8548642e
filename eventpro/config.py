# eventpro/config.py
from decouple import Csv, config

MONGO_URI = config("MONGO_URI", default="mongodb://localhost:27017")
MONGO_DB_NAME = config("MONGO_DB_NAME", default="eventpro")

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

HOST = config("HOST", default="0.0.0.0")
PORT = config("PORT", default=3000, cast=int)
CORS_ORIGINS = config("CORS_ORIGINS", default="*", cast=Csv())
