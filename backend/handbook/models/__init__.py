from .user import User
from .section import Section
from .content_item import ContentItem
from .container_instance import ContainerInstance
