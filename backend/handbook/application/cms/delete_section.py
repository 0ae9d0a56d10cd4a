from handbook.extensions import db
from handbook.models.section import Section
from handbook.utils.transaction import transactional


def delete_section(*, section_id: str) -> None:
    """
    Hard-delete a section.

    Its content items and their container instances go with it
    (ORM cascade: Section -> ContentItem -> ContainerInstance).
    """
    section = Section.query.filter_by(id=section_id).first_or_404(
        description="Section not found"
    )

    with transactional():
        db.session.delete(section)
