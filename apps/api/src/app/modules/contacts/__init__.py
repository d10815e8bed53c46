"""
Contact Messages Module

API Endpoints:
- POST /submit_contact - Send a message through the website contact form
"""

from .router import router

__all__ = ["router"]
