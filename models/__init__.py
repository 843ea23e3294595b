from .user import User
from .product import Product
from .quote import Quote
from .project import Project
from .blog_post import BlogPost
from .contact import Contact
from .team_member import TeamMember
from .success_story import SuccessStory
from .page_view import PageView
from .achievement import Achievement, UserAchievement, GamificationStats

__all__ = [
    'User', 'Product', 'Quote', 'Project', 'BlogPost', 'Contact',
    'TeamMember', 'SuccessStory', 'PageView',
    'Achievement', 'UserAchievement', 'GamificationStats',
]
