"""
FastAPI dependencies
"""

from core.database import get_session

# One session per request, closed when the response is sent
get_db = get_session
