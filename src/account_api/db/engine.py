"""MongoDB client factory.

Learn: One AsyncMongoClient per process, created at startup and closed
at shutdown. The client owns a connection pool and is safe to share
between concurrent requests. Two independent timeouts apply:
- connect/server selection: bounded by mongo_connect_timeout_seconds
- every operation: bounded by mongo_query_timeout_seconds (timeoutMS)
Retries are disabled; a failure surfaces to the caller immediately.
"""

from pymongo import AsyncMongoClient

from account_api.config import Settings


def create_client(settings: Settings) -> AsyncMongoClient:
    connect_ms = int(settings.mongo_connect_timeout_seconds * 1000)
    return AsyncMongoClient(
        settings.mongo_uri,
        connectTimeoutMS=connect_ms,
        serverSelectionTimeoutMS=connect_ms,
        timeoutMS=int(settings.mongo_query_timeout_seconds * 1000),
        retryReads=False,
        retryWrites=False,
        tz_aware=True,
    )
