"""
User-visible chat texts and prompt markers. Keep these simple and documented.
"""

# Terminal entry for any failed turn
GENERIC_FAILURE_MESSAGE: str = "Oops, something went wrong. Please try again."
# Search client notices
NO_PODCASTS_MESSAGE: str = "No podcasts found for this search. Try something else!"
SEARCH_FAILED_MESSAGE: str = "Failed to fetch podcasts. Please check your connection and try again."
SEARCHING_MESSAGE: str = '🔎 Finding podcasts about "{term}"...'

# Digest used in the contextual prompt when a search returned nothing
NO_PODCASTS_DIGEST: str = "No podcasts available"

EXAMPLE_PROMPTS: tuple[str, ...] = (
    "I am stressed out, suggest a podcast to relax",
    "I want to learn more about cybersecurity",
    "Relationship advice? 👀",
)
