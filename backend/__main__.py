"""
Entry point for running the API with `python -m backend`.

Host, port and reload can be set with HOST, PORT and RELOAD.
"""
import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "backend.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8001")),
        reload=os.environ.get("RELOAD", "").lower() in ("1", "true", "yes"),
    )
