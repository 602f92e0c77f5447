"""
Jobs programados (APScheduler).
"""
from .daily_scrape import DAILY_SCRAPE_JOB_ID, create_scheduler, scheduled_scrape

__all__ = ["DAILY_SCRAPE_JOB_ID", "create_scheduler", "scheduled_scrape"]
