"""Fix rules and the audit-ID dispatch tables."""

from typing import Any, Callable

from ..models import Fix
from . import accessibility, best_practices, performance, seo
from .framework import check_framework

Rule = Callable[[dict[str, Any]], Fix]

PERFORMANCE_RULES: dict[str, Rule] = {
    "server-response-time": performance.server_response_time,
    "unused-javascript": performance.unused_javascript,
    "speed-index": performance.speed_index,
    "lcp-breakdown-insight": performance.lcp_breakdown,
    "document-latency-insight": performance.document_latency,
    "max-potential-fid": performance.max_potential_fid,
    "render-blocking-resources": performance.render_blocking_resources,
    "unminified-css": performance.unminified_css,
    "unminified-javascript": performance.unminified_javascript,
    "unused-css-rules": performance.unused_css_rules,
    "modern-image-formats": performance.modern_image_formats,
    "offscreen-images": performance.offscreen_images,
    "uses-optimized-images": performance.uses_optimized_images,
    "document-title": performance.document_title,
}

ACCESSIBILITY_RULES: dict[str, Rule] = {
    "color-contrast": accessibility.color_contrast,
    "heading-order": accessibility.heading_order,
    "image-alt": accessibility.image_alt,
    "label": accessibility.label,
    "button-name": accessibility.button_name,
    "link-name": accessibility.link_name,
}

SEO_RULES: dict[str, Rule] = {
    "meta-description": seo.meta_description,
    "canonical": seo.canonical,
    "structured-data": seo.structured_data,
}

BEST_PRACTICES_RULES: dict[str, Rule] = {
    "errors-in-console": best_practices.errors_in_console,
    "valid-source-maps": best_practices.valid_source_maps,
    "bf-cache": best_practices.bf_cache,
    "viewport": best_practices.viewport,
    "http-status-code": best_practices.http_status_code,
    "no-vulnerable-libraries": best_practices.no_vulnerable_libraries,
}

# Shared by every category pass.
RULES: dict[str, Rule] = {
    **PERFORMANCE_RULES,
    **ACCESSIBILITY_RULES,
    **SEO_RULES,
    **BEST_PRACTICES_RULES,
}

# Categories are scanned in this order.
CATEGORY_ORDER = ("performance", "accessibility", "seo", "best-practices")

__all__ = [
    "Rule",
    "PERFORMANCE_RULES",
    "ACCESSIBILITY_RULES",
    "SEO_RULES",
    "BEST_PRACTICES_RULES",
    "RULES",
    "CATEGORY_ORDER",
    "check_framework",
]
