from .user import User, UserRole
from .user_subject import UserSubject, StudentTeacher, SubjectRole
from .subject import Subject
from .quiz import Quiz
from .quiz_answer import QuizAnswer
from .feedback import Feedback, FeedbackDirection

__all__ = [
    "User", "UserRole",
    "UserSubject", "StudentTeacher", "SubjectRole",
    "Subject",
    "Quiz",
    "QuizAnswer",
    "Feedback", "FeedbackDirection",
]
