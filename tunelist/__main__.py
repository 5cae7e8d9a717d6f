# ============================================================================
# FILE: tunelist/__main__.py
# Development server: python -m tunelist
# ============================================================================
import uvicorn
from tunelist.config import settings


def main():
    uvicorn.run(
        "tunelist.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    main()
