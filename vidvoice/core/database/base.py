# File: vidvoice/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Preference and voice-log tables inherit from this.
Base = declarative_base()
