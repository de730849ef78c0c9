#!/usr/bin/env python3
"""
Search-as-you-type API
Run script for the FastAPI application
"""

import os
import uvicorn

if __name__ == "__main__":
    port = int(os.getenv("PORT", 8000))
    host = os.getenv("HOST", "0.0.0.0")
    
    print(f"🚀 Starting Search-as-you-type API")
    print(f"📍 Server will run on http://{host}:{port}")
    print(f"📚 API documentation available at http://{host}:{port}/docs")
    print(f"⌨️  Autocomplete websocket at ws://{host}:{port}/api/autocomplete/ws")
    
    uvicorn.run(
        "typeahead.main:app",
        host=host,
        port=port,
        reload=True,  # Enable auto-reload for development
        access_log=True
    )
