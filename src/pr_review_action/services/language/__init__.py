from .language_detector import LanguageDetector

__all__ = ["LanguageDetector"]
