"""JSF session protocol and markup heuristics for scaha.net pages."""

from .markup import FormLayout, ParsedPage, detect_form_layout, parse_page, parse_select_options
from .session import JSFClient, JSFSession, extract_updated_fragment

__all__ = [
    "FormLayout",
    "ParsedPage",
    "detect_form_layout",
    "parse_page",
    "parse_select_options",
    "JSFClient",
    "JSFSession",
    "extract_updated_fragment",
]
