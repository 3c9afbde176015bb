"""Decision analytics: tagging, sentiment, clustering, querying and insights."""
