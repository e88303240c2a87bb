"""Core building blocks: API client, STQL builder, metric normalizer and formatters."""
