import os

bind = f"0.0.0.0:{os.getenv('PORT', 8000)}"
# Channel subscriptions live in process memory; keep to one worker per instance
workers = int(os.getenv('WEB_CONCURRENCY', 1))
worker_class = "fellowship.core.workers.FellowshipWorker"
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 100
preload_app = True
