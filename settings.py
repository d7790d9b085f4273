from __future__ import annotations
import os
from typing import List, Optional


APP_NAME = os.getenv("APP_NAME", "Guna Milan Compatibility REST")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "false").lower() in {"1","true","yes","on"}

CORS_ALLOW_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
TRUSTED_HOSTS: List[str] = [h.strip() for h in os.getenv("TRUSTED_HOSTS", "*").split(",") if h.strip()]
GZIP_MIN_SIZE = int(os.getenv("GZIP_MIN_SIZE", "1000"))
REQUEST_LOGGING = os.getenv("REQUEST_LOGGING", "basic").lower()  # "off" | "basic" | "full"
LOG_LEVEL = os.getenv("LOG_LEVEL", "debug" if DEBUG else "info").lower()

# YAML file of profiles served by the id-based endpoints; empty store when unset
PROFILE_STORE_PATH: Optional[str] = os.getenv("PROFILE_STORE_PATH") or None
# Default for the Bhakoot 2/12 switch
STRICT_TRADITION = os.getenv("STRICT_TRADITION", "false").lower() in {"1","true","yes","on"}
