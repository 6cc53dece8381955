"""Package entry point for ``python -m design_translator``.

HOW: Delegates to server.app.run(), which validates credentials and
serves the Slack events endpoint with uvicorn.
"""

from design_translator.server.app import run

if __name__ == "__main__":
    run()
