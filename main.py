from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from config import get_settings
from logger import setup_logger
from metrics import CollectorError, snapshot
import logging, socket, sys, uvicorn

LOGGER_NAME = "server_dashboard"
STATS_PATH = "/api/stats"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

log = logging.getLogger(LOGGER_NAME)


def stats(request):
    # sync on purpose: it runs in the threadpool, so the 1s CPU window
    # only holds up this request
    try:
        data = snapshot()
    except CollectorError as exc:
        log.error("stats collection failed: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=500,
                            headers=CORS_HEADERS)
    return JSONResponse(data, headers=CORS_HEADERS)


def create_app(settings):
    app = FastAPI(title="Server Dashboard")
    # no method list: every verb, preflights included, reaches stats()
    app.add_route(STATS_PATH, stats)
    # must stay last: it swallows every path the API does not claim
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True),
              name="static")
    return app


app = create_app(get_settings())


def main():
    settings = get_settings()
    setup_logger(LOGGER_NAME, settings.log_level)

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((settings.host, settings.port))
    except OSError as exc:
        log.error("cannot listen on %s:%s: %s", settings.host, settings.port, exc)
        sock.close()
        sys.exit(1)

    log.info("Server dashboard running on http://%s:%s", settings.host, settings.port)
    config = uvicorn.Config(app, log_level=settings.log_level.lower())
    uvicorn.Server(config).run(sockets=[sock])


if __name__ == "__main__":
    main()
