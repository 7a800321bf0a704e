import os

from dotenv import find_dotenv, load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# The engine is built at import time, so .env must be loaded first
load_dotenv(find_dotenv(usecwd=True))

# PostgreSQL in production; a local SQLite file otherwise
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./portfolio.db")

# SQLite needs check_same_thread; other drivers reject the argument
connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(DATABASE_URL, connect_args=connect_args)

# One session per request, see deps.get_db
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Declarative base shared by Photo and CitySet
Base = declarative_base()
