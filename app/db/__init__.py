from app.db.session import SessionLocal, engine, get_db, ping

__all__ = ["engine", "SessionLocal", "get_db", "ping"]
