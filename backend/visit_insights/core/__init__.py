"""Cross-cutting helpers: errors, request context, translations, logging."""
