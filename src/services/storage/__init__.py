"""Supabase storage integration.

Public API:
    - SupabaseConnector: lazily created async Supabase client
    - ImageStore: uploads plan images and returns their public URL
    - PlanStore: insert / select / delete of tour plan rows
    - create_supabase_connector: factory building the connector from settings
"""
from src.services.storage.client import (
    ImageStore,
    PlanStore,
    SupabaseConnector,
    create_supabase_connector,
)

__all__ = [
    "ImageStore",
    "PlanStore",
    "SupabaseConnector",
    "create_supabase_connector",
]
