"""MongoDB connection helpers."""

from __future__ import annotations

from pymongo import MongoClient


def connect_db(uri: str) -> MongoClient:
    """Connect to MongoDB and confirm the server answers a ping."""
    if not uri:
        raise ValueError("MongoDB URI is empty")
    client = MongoClient(uri)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    print("Pinged your deployment. You successfully connected to MongoDB!")
    return client


def disconnect_db(client: MongoClient) -> None:
    """Close the client's connections."""
    client.close()