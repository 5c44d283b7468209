"""Pokemon species API facade with fun translations, caching and retries."""
