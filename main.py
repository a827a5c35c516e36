"""
Review Radar - Web Server Entry Point
=====================================

Run this to start the API:
    python main.py

Then POST a place name or Google Maps URL to http://127.0.0.1:8000/analyze

To analyze from the command line:
    python run_analysis.py "Blue Bottle Coffee"
"""

import os

import uvicorn


def main():
    """Start the web server."""
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))

    print("\n" + "=" * 50)
    print("   Review Radar - Analysis API")
    print("=" * 50)
    print(f"\n   Starting server at http://{host}:{port}")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "review_radar.web.app:app",
        host=host,
        port=port,
        reload=os.getenv("RELOAD", "").lower() in ("1", "true", "yes"),
        log_level="info"
    )


if __name__ == "__main__":
    main()
