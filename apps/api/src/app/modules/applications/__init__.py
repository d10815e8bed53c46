"""
Admission Applications Module

Handles the website's admission form:
1. Field resolution across HTML and storage field names
2. Validation with blocking errors and advisory warnings
3. Date-of-birth and phone normalization
4. Persistence with an external APP reference
5. Best-effort notification to the admissions office

API Endpoints:
- POST /submit_application - Submit an admission application
"""

from .router import router

__all__ = ["router"]
