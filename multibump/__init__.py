"""multibump - bump one npm dependency across many repositories."""
