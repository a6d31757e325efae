# run_dev.py
"""
Local development launcher for FastAPI.
Equivalent to: `uvicorn salesnav.app:app --reload --host 0.0.0.0 --port 8000`
"""

import uvicorn

from salesnav.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "salesnav.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
    )
