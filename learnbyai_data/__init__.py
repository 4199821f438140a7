"""Data-access layer for the LearnByAi platform.

Wraps MongoDB (book metadata, pages, history) and Pinecone (similarity
search) behind small async services.
"""

__version__ = "0.1.0"
