#!/usr/bin/env python
"""Script to run the Planner API server."""
import uvicorn

from planner.config import HOST, PORT

if __name__ == "__main__":
    uvicorn.run(
        "planner.main:app",
        host=HOST,
        port=PORT,
        reload=True
    )
