# gunicorn -c admin_api/gunicorn_conf.py admin_api.main:app
import multiprocessing
import os

from admin_api.common.config import Config

bind = f"{Config.UVICORN_HOST}:{Config.UVICORN_PORT}"

# bcrypt runs in worker threads, a couple of processes per core is plenty
workers = int(os.getenv("WEB_CONCURRENCY", max(2, multiprocessing.cpu_count())))

worker_class = "uvicorn.workers.UvicornWorker"

loglevel = "info"
accesslog = None #uvicorn.access is silenced, app loggers cover requests
errorlog = "-"

timeout = 30
graceful_timeout = 30

reload = False
