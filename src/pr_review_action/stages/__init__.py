from .comment_publishing import CommentPublishingStage
from .file_retrieval import FileRetrievalStage
from .review_generation import ReviewGenerationStage

__all__ = ["CommentPublishingStage", "FileRetrievalStage", "ReviewGenerationStage"]
