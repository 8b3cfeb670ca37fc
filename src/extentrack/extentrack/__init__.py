"""ExtenTrack package.

University extension-program tracking: admins manage coordinators,
coordinators manage projects, students and hours, and students download
their hours report by registration number. Organized by feature modules
with thin Flask controllers over service/repository layers.
"""
from .main import create_app

__all__ = ["create_app"]
