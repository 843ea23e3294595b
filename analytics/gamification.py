import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.achievement import Achievement, GamificationStats, UserAchievement
from models.project import Project
from models.quote import Quote

logger = logging.getLogger(__name__)

POINTS_PER_QUOTE = 10
POINTS_PER_PROJECT = 25
POINTS_PER_ACHIEVEMENT = 5
POINTS_PER_LEVEL = 100

DEFAULT_ACHIEVEMENTS = [
    {"name": "First Quote", "description": "Create your first quote", "icon": "target",
     "category": "quotes", "requirement": 1, "points": 10, "badge": "bronze"},
    {"name": "Quote Master", "description": "Create 10 quotes", "icon": "trophy",
     "category": "quotes", "requirement": 10, "points": 50, "badge": "gold"},
    {"name": "Project Pioneer", "description": "Complete your first project", "icon": "rocket",
     "category": "projects", "requirement": 1, "points": 25, "badge": "silver"},
]


def calculate_points(quotes: int, projects: int, achievements: int) -> int:
    return quotes * POINTS_PER_QUOTE + projects * POINTS_PER_PROJECT + achievements * POINTS_PER_ACHIEVEMENT


def calculate_level(total_points: int) -> int:
    return total_points // POINTS_PER_LEVEL + 1


# ============================================================
# ACHIEVEMENTS
# ============================================================

def get_achievements(db: Session) -> List[Achievement]:
    return (
        db.query(Achievement)
        .filter(Achievement.active.is_(True))
        .order_by(Achievement.category, Achievement.requirement)
        .all()
    )


def initialize_default_achievements(db: Session) -> int:
    if db.query(Achievement.id).first():
        logger.info("Default achievements already exist")
        return 0

    for data in DEFAULT_ACHIEVEMENTS:
        db.add(Achievement(**data))
    db.commit()
    logger.info("Default achievements initialized")
    return len(DEFAULT_ACHIEVEMENTS)


def get_user_achievements(db: Session, user_id: str) -> List[dict]:
    rows = (
        db.query(UserAchievement, Achievement)
        .join(Achievement, UserAchievement.achievement_id == Achievement.id)
        .filter(UserAchievement.user_id == user_id)
        .order_by(UserAchievement.unlocked_at.desc())
        .all()
    )
    return [
        {
            "id": unlocked.id,
            "achievement_id": achievement.id,
            "name": achievement.name,
            "description": achievement.description,
            "icon": achievement.icon,
            "points": achievement.points,
            "badge": achievement.badge,
            "progress": unlocked.progress,
            "unlocked_at": unlocked.unlocked_at,
        }
        for unlocked, achievement in rows
    ]


# ============================================================
# STATS
# ============================================================

def get_stats(db: Session, user_id: str) -> Optional[GamificationStats]:
    return db.query(GamificationStats).filter(GamificationStats.user_id == user_id).first()


def update_stats(db: Session, user_id: str) -> GamificationStats:
    """Recount quotes, completed projects and unlocked achievements, then upsert."""
    quotes = db.query(func.count(Quote.id)).scalar() or 0
    projects = db.query(func.count(Project.id)).filter(Project.status == "completed").scalar() or 0
    achievements = (
        db.query(func.count(UserAchievement.id))
        .filter(UserAchievement.user_id == user_id)
        .scalar() or 0
    )

    total_points = calculate_points(quotes, projects, achievements)

    stats = get_stats(db, user_id)
    if stats is None:
        stats = GamificationStats(user_id=user_id)
        db.add(stats)

    stats.total_points = total_points
    stats.level = calculate_level(total_points)
    stats.quotes_created = quotes
    stats.projects_completed = projects
    stats.achievements_unlocked = achievements
    stats.last_active = func.now()
    stats.updated_at = func.now()

    db.commit()
    db.refresh(stats)
    return stats


def check_and_unlock_milestones(db: Session, user_id: str) -> List[Achievement]:
    stats = update_stats(db, user_id)

    unlocked_ids = {
        row.achievement_id
        for row in db.query(UserAchievement.achievement_id).filter(UserAchievement.user_id == user_id)
    }

    newly_unlocked = []
    for achievement in get_achievements(db):
        if achievement.id in unlocked_ids:
            continue

        if achievement.category == "quotes":
            reached = stats.quotes_created >= achievement.requirement
        elif achievement.category == "projects":
            reached = stats.projects_completed >= achievement.requirement
        elif achievement.category == "engagement":
            reached = stats.total_points >= achievement.requirement
        else:
            reached = False

        if reached:
            db.add(UserAchievement(user_id=user_id, achievement_id=achievement.id, progress=100))
            newly_unlocked.append(achievement)

    if newly_unlocked:
        db.commit()
        update_stats(db, user_id)
        logger.info("User %s unlocked %d achievement(s)", user_id, len(newly_unlocked))

    return newly_unlocked
