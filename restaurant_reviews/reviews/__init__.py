"""
Restaurant reviews.

Responsibilities:
- Append reviews to a restaurant's partition, stamped with server time.
- List a restaurant's reviews newest first.
- Summarise ratings (count and average) for display.
"""
