"""Day tracker entry point.

Usage:
    python -m daytracker [--config PATH | --profile NAME] COMMAND [ARGS]

Run with --help for the list of commands.
"""

import argparse
import logging
import sys
import time
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .ai import CoachClient, CoachClientConfig, CoachError, CoachTemperatures, DayCoach
from .config import TrackerConfig
from .config.loader import load_config
from .config.profiles import detect_profile
from .engine.day_stats import compute_day_stats, greeting, sleep_status, wake_up_status
from .engine.goals import days_left_in_week, goal_progress
from .engine.streaks import top_streak, utc_today
from .engine.timeclock import ParseError, calculate_duration
from .reminders import Reminder, ReminderChecker, ReminderScheduler
from .service import TrackerService
from .storage import DayStore, JSONStore, StorageError
from .tracker.errors import TrackerError
from .tracker.log import available_tasks, suggest_next_task

logger = logging.getLogger("daytracker")


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_store(config: TrackerConfig) -> DayStore:
    """Create the configured storage backend."""
    if config.storage.backend == "mongo":
        from .storage.mongo_store import MongoDayStore

        return MongoDayStore.connect(config.storage.mongo_uri, config.storage.mongo_database)
    return JSONStore(Path(config.storage.data_path).expanduser())


def build_coach(config: TrackerConfig) -> DayCoach:
    """Create the AI coach.

    Raises:
        ValueError: If AI is disabled or no API key is configured
    """
    if not config.ai.enabled:
        raise ValueError("AI features are disabled in the configuration.")
    client_config = CoachClientConfig.from_env(
        model=config.ai.model,
        max_tokens=config.ai.max_tokens,
        timeout_seconds=config.ai.timeout_seconds,
    )
    temperatures = CoachTemperatures(
        suggestion=config.ai.suggestion_temperature,
        summary=config.ai.summary_temperature,
        tip=config.ai.tip_temperature,
        plan=config.ai.plan_temperature,
    )
    return DayCoach(CoachClient(client_config), temperatures)


def _today() -> str:
    return date.today().isoformat()


def cmd_add_day(service: TrackerService, args: argparse.Namespace) -> int:
    day = service.create_day(args.date)
    print(f"Added {day.date} with {len(day.activities)} activities")
    return 0


def cmd_delete_day(service: TrackerService, args: argparse.Namespace) -> int:
    service.delete_day(args.date)
    print(f"Day deleted: {args.date}")
    return 0


def cmd_log(service: TrackerService, args: argparse.Namespace) -> int:
    day_date = args.date or _today()
    activity = service.log_activity(day_date, args.task, args.start, args.end)
    print(f"Added: {activity.task} at {activity.start_time} (id {activity.id})")

    next_task = suggest_next_task(service.log.require(day_date), args.start)
    if next_task:
        print(f"Next up: {next_task}?")
    return 0


def cmd_edit(service: TrackerService, args: argparse.Namespace) -> int:
    activity = service.edit_activity(args.date, args.id, args.start, args.end)
    span = activity.start_time + (f" - {activity.end_time}" if activity.end_time else "")
    print(f"Updated: {activity.task} {span}")
    return 0


def cmd_remove(service: TrackerService, args: argparse.Namespace) -> int:
    activity = service.remove_activity(args.date, args.id)
    print(f"Removed: {activity.task}")
    return 0


def cmd_show(service: TrackerService, args: argparse.Namespace) -> int:
    day_date = args.date or _today()
    day = service.log.get(day_date)
    if day is None:
        print(f"No activities logged for {day_date}")
        return 1

    print(datetime.fromisoformat(day_date).strftime("%A, %B %d, %Y"))
    for activity in day.activities:
        icon = service.catalog.icon(activity.task)
        span = activity.start_time
        if activity.end_time:
            span += f" - {activity.end_time} ({calculate_duration(activity.start_time, activity.end_time)})"
        print(f"  [{activity.id}] {icon} {activity.task}: {span}")

    print(compute_day_stats(day, service.catalog).summary())
    wake, sleep = wake_up_status(day), sleep_status(day)
    if wake:
        print(f"  Woke up {wake.time}{' (early bird)' if wake.early else ''}")
    if sleep:
        print(f"  Slept {sleep.time}{' (on time)' if sleep.early else ' (late)'}")
    return 0


def cmd_days(service: TrackerService, args: argparse.Namespace) -> int:
    title, subtitle = greeting(datetime.now())
    print(f"{title} {subtitle}")
    for day in service.days():
        stats = compute_day_stats(day, service.catalog)
        print(f"  {day.date}: {stats.activity_count} activities, {stats.productive_ratio:.0%} work & growth")
    return 0


def cmd_tasks(service: TrackerService, args: argparse.Namespace) -> int:
    names = set(service.catalog.names)
    if args.date:
        names = set(available_tasks(service.log.get(args.date), service.catalog))

    for task in service.catalog:
        if task.name not in names:
            continue
        flags = [
            name
            for name, on in (
                ("point-in-time", task.point_in_time),
                ("productive", task.productive),
                ("streak", task.streak_tracked),
            )
            if on
        ]
        print(f"  {task.icon} {task.name}" + (f" ({', '.join(flags)})" if flags else ""))
    return 0


def cmd_task_add(service: TrackerService, args: argparse.Namespace) -> int:
    if service.add_task(args.name, point_in_time=args.point_in_time):
        print(f"New task added: {args.name.strip()}")
    else:
        print(f"Task already exists: {args.name.strip()}")
    return 0


def cmd_streak(service: TrackerService, args: argparse.Namespace) -> int:
    today = utc_today()
    result = service.streaks(args.task, today)
    title = f"{args.task} Streak" if args.task else "Overall Consistency"
    print(f"{title}: current {result.current_streak}, longest {result.longest_streak}")

    best = top_streak(service.days(), service.catalog.streak_tasks, today)
    if best:
        print(f"Top Streak: {best.task} ({best.streak} days)")
    return 0


def cmd_goals(service: TrackerService, args: argparse.Namespace) -> int:
    progress = service.goal_progress(date.today())
    if not progress:
        print("No goals yet.")
    for item in progress:
        status = "done" if item.achieved else f"{item.remaining} to go"
        print(
            f"  [{item.goal.id}] {item.goal.task}: {item.completed}/{item.goal.frequency} "
            f"this week ({status}, {item.days_left} days left)"
        )
    return 0


def cmd_goal_add(service: TrackerService, args: argparse.Namespace) -> int:
    goal = service.add_goal(args.task, args.frequency)
    print(f"Goal added: {goal.task} {goal.frequency}x per week (id {goal.id})")
    return 0


def cmd_goal_remove(service: TrackerService, args: argparse.Namespace) -> int:
    goal = service.remove_goal(args.id)
    print(f"Goal removed: {goal.task}")
    return 0


def cmd_remind(service: TrackerService, args: argparse.Namespace, config: TrackerConfig) -> int:
    checker = ReminderChecker(
        enabled=True,
        idle_threshold_minutes=config.reminders.idle_threshold_minutes,
    )

    def notify(reminder: Reminder) -> None:
        print(f"{reminder.title}: {reminder.body}")

    scheduler = ReminderScheduler(
        checker,
        service.days,
        notify,
        interval_minutes=config.reminders.interval_minutes,
    )
    if not args.watch:
        if scheduler.run_once() is None:
            print("Nothing to remind you about.")
        return 0

    scheduler.start()
    try:
        while scheduler.is_running:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
    finally:
        scheduler.stop()
    return 0


def cmd_suggest(service: TrackerService, args: argparse.Namespace, config: TrackerConfig) -> int:
    suggestion = build_coach(config).suggest_task(service.days(), service.catalog.names, datetime.now())
    if suggestion is None:
        print("No suggestion available.")
        return 1
    print(f"Suggested task: {suggestion}")
    return 0


def cmd_summary(service: TrackerService, args: argparse.Namespace, config: TrackerConfig) -> int:
    print(build_coach(config).weekly_summary(service.days(), service.catalog.names, datetime.now()))
    return 0


def cmd_tip(service: TrackerService, args: argparse.Namespace, config: TrackerConfig) -> int:
    goal = service.goals.get(args.id)
    if goal is None:
        print(f"No goal {args.id}", file=sys.stderr)
        return 1
    today = date.today()
    progress = goal_progress(goal, service.days(), today)
    print(build_coach(config).coaching_tip(goal, progress, days_left_in_week(today)))
    return 0


def cmd_plan(service: TrackerService, args: argparse.Namespace, config: TrackerConfig) -> int:
    plan = build_coach(config).daily_plan(service.days(), list(service.goals), datetime.now())
    for item in plan:
        print(f"  - {item}")
    return 0


COMMANDS: dict[str, Callable[[TrackerService, argparse.Namespace], int]] = {
    "add-day": cmd_add_day,
    "delete-day": cmd_delete_day,
    "log": cmd_log,
    "edit": cmd_edit,
    "remove": cmd_remove,
    "show": cmd_show,
    "days": cmd_days,
    "tasks": cmd_tasks,
    "task-add": cmd_task_add,
    "streak": cmd_streak,
    "goals": cmd_goals,
    "goal-add": cmd_goal_add,
    "goal-remove": cmd_goal_remove,
}

CONFIG_COMMANDS: dict[str, Callable[[TrackerService, argparse.Namespace, TrackerConfig], int]] = {
    "remind": cmd_remind,
    "suggest": cmd_suggest,
    "summary": cmd_summary,
    "tip": cmd_tip,
    "plan": cmd_plan,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="daytracker",
        description="Day Tracker - log your day, keep your streaks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m daytracker log Exercise 07:00 07:45 --date 2025-01-04
  python -m daytracker show 2025-01-04
  python -m daytracker streak --task Exercise

Environment:
  DAYTRACKER_PROFILE    Set profile (dev, prod, test)
  ANTHROPIC_API_KEY     API key for AI features
""",
    )
    parser.add_argument("--config", type=Path, metavar="PATH", help="Path to YAML config file")
    parser.add_argument("--profile", choices=["dev", "prod", "test"], help="Configuration profile to use")
    parser.add_argument("--version", action="version", version=f"Day Tracker v{__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add-day", help="Create a day")
    p.add_argument("date", help="YYYY-MM-DD")

    p = sub.add_parser("delete-day", help="Delete a day and its activities")
    p.add_argument("date", help="YYYY-MM-DD")

    p = sub.add_parser("log", help="Log an activity")
    p.add_argument("task")
    p.add_argument("start", help="Start time HH:MM")
    p.add_argument("end", nargs="?", help="End time HH:MM (default: start + 30 minutes)")
    p.add_argument("--date", help="YYYY-MM-DD (default: today)")

    p = sub.add_parser("edit", help="Change the times of an activity")
    p.add_argument("date")
    p.add_argument("id", type=int)
    p.add_argument("start", help="Start time HH:MM")
    p.add_argument("end", nargs="?", help="End time HH:MM")

    p = sub.add_parser("remove", help="Remove an activity")
    p.add_argument("date")
    p.add_argument("id", type=int)

    p = sub.add_parser("show", help="Show a day")
    p.add_argument("date", nargs="?", help="YYYY-MM-DD (default: today)")

    sub.add_parser("days", help="List all days")
    p = sub.add_parser("tasks", help="List the task catalog")
    p.add_argument("--date", help="Only tasks that can still be logged on YYYY-MM-DD")

    p = sub.add_parser("task-add", help="Add a custom task")
    p.add_argument("name")
    p.add_argument("--point-in-time", action="store_true", help="Task has no end time")

    p = sub.add_parser("streak", help="Show current and longest streak")
    p.add_argument("--task", help="Task to track (default: overall)")

    sub.add_parser("goals", help="Show weekly goal progress")

    p = sub.add_parser("goal-add", help="Add a weekly goal")
    p.add_argument("task")
    p.add_argument("frequency", type=int, help="Times per week")

    p = sub.add_parser("goal-remove", help="Remove a goal")
    p.add_argument("id", type=int)

    p = sub.add_parser("remind", help="Check whether a logging reminder is due")
    p.add_argument("--watch", action="store_true", help="Keep checking in the background")

    sub.add_parser("suggest", help="AI: guess what you are doing now")
    sub.add_parser("summary", help="AI: summarize your week")

    p = sub.add_parser("tip", help="AI: coaching tip for a goal")
    p.add_argument("id", type=int)

    sub.add_parser("plan", help="AI: suggest a plan for today")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the day tracker.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        if args.config:
            config = load_config(path=args.config)
        else:
            config = load_config(profile=args.profile or detect_profile().value)
    except FileNotFoundError as e:
        print(f"Error: Config file not found: {e}", file=sys.stderr)
        return 1
    except (TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level)

    try:
        service = TrackerService(build_store(config))
        if args.command in CONFIG_COMMANDS:
            return CONFIG_COMMANDS[args.command](service, args, config)
        return COMMANDS[args.command](service, args)
    except (TrackerError, ParseError, KeyError, ValueError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"Error: {message}", file=sys.stderr)
        return 1
    except CoachError as e:
        logger.error(f"AI request failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except StorageError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
