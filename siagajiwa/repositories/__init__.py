from siagajiwa.repositories.media import MediaRepository
from siagajiwa.repositories.quiz import QuizRepository
from siagajiwa.repositories.user import ProfileNotFoundError, UserRepository

__all__ = [
    "MediaRepository",
    "ProfileNotFoundError",
    "QuizRepository",
    "UserRepository",
]
