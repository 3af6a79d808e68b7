"""
Login-time consistency check between what a user claims on the login form
(subjects, teachers, teaching subjects) and what was stored at signup.

This is not authorization. It only catches a user picking the wrong profile
on the login screen; the password check is the only credential. Nothing else
in the application is gated on its outcome.
"""

from typing import Iterable

from quizboard.models import UserRole


def _intersects(claimed: Iterable, stored: Iterable) -> bool:
    return bool(set(claimed) & set(stored))


def claims_match_assignment(role: UserRole,
                            stored_subjects: Iterable[str] = (),
                            stored_teacher_ids: Iterable[int] = (),
                            stored_teacher_subjects: Iterable[str] = (),
                            claimed_subjects: Iterable[str] = (),
                            claimed_teacher_ids: Iterable[int] = (),
                            claimed_teacher_subjects: Iterable[str] = ()) -> bool:
    """Return True when the login claims agree with the stored assignment.

    Students pass when they claim nothing, or when either the claimed subjects
    or the claimed teachers overlap the stored ones. Teachers pass when they
    claim nothing, have nothing stored, or share at least one teaching subject.
    """
    claimed_subjects = list(claimed_subjects or [])
    claimed_teacher_ids = list(claimed_teacher_ids or [])
    claimed_teacher_subjects = list(claimed_teacher_subjects or [])

    if role == UserRole.student:
        if not claimed_subjects and not claimed_teacher_ids:
            return True
        return (_intersects(claimed_subjects, stored_subjects)
                or _intersects(claimed_teacher_ids, stored_teacher_ids))

    if role == UserRole.teacher:
        stored_teacher_subjects = list(stored_teacher_subjects or [])
        if not claimed_teacher_subjects or not stored_teacher_subjects:
            return True
        return _intersects(claimed_teacher_subjects, stored_teacher_subjects)

    return True
