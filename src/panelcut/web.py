#!/usr/bin/env python3
"""웹 서버 진입점"""


def run_server(host: str = "0.0.0.0", port: int = 8000):
    """웹 서버 시작"""
    import uvicorn
    from .web_app.server import app

    print("Starting Panelcut Web Server...")
    print(f"API docs: http://localhost:{port}/docs")
    uvicorn.run(app, host=host, port=port)
