"""Backend-level constants shared across modules."""
from __future__ import annotations

SERVER_PORT = 3000
BIND_ADDRESS = "0.0.0.0"

WELCOME_MESSAGE = "Welcome to Test application."

DB_CONNECTED_MESSAGE = "Connected to the database!"
DB_CONNECT_FAILED_MESSAGE = "Cannot connect to the database!"
SERVER_LISTENING_MESSAGE = "Server is running on port {}."

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"
