from handbook.extensions import db
from handbook.models.content_item import ContentItem
from handbook.models.user import User
from handbook.utils.transaction import transactional


def delete_user(*, user_id: str, actor_id: str) -> None:
    """
    Delete an account. Content the user wrote stays, without an author.
    Admins cannot delete themselves.
    """
    if user_id == actor_id:
        raise ValueError("You cannot delete your own account")

    user = User.query.filter_by(id=user_id).first_or_404(description="User not found")

    with transactional():
        ContentItem.query.filter_by(author_id=user.id).update(
            {"author_id": None}, synchronize_session=False
        )
        db.session.delete(user)
