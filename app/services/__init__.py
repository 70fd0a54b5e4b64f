"""
app/services package marker.
"""

from app.services.categorization_service import CategorizationService
from app.services.category_report import count_categories, summarize_categories
from app.services.domain_loader import DomainListError, load_domains
from app.services.resume import ResumeIndex

__all__ = [
    "CategorizationService",
    "count_categories",
    "summarize_categories",
    "DomainListError",
    "load_domains",
    "ResumeIndex",
]
