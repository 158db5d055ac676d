import os

from invento.core.config import settings

bind = f"0.0.0.0:{os.getenv('PORT', 8000)}"
workers = int(os.getenv('WEB_CONCURRENCY', 2))
worker_class = "uvicorn.workers.UvicornWorker"
wsgi_app = "invento.main:app"
loglevel = settings.LOG_LEVEL.lower()
# Each worker owns a pool of DB_POOL_SIZE + DB_MAX_OVERFLOW connections
timeout = settings.DB_POOL_TIMEOUT + 30
max_requests = 1000
max_requests_jitter = 100
preload_app = True
