"""
Print the puzzle for a day (answer key). Run: python -m heatmap_guessr.daily [--date YYYY-MM-DD]
"""
import argparse

from .pool import get_service
from .selector import InvalidDateKey, get_date_key, parse_date_key, puzzle_index, select_puzzle


def main() -> None:
    p = argparse.ArgumentParser(description="Show which puzzle a day maps to.")
    p.add_argument("--date", help="YYYY-MM-DD; defaults to today")
    args = p.parse_args()

    service = get_service()
    date_key = args.date or get_date_key()
    try:
        parse_date_key(date_key)
    except InvalidDateKey as e:
        p.error(str(e))
    puzzle = select_puzzle(date_key, service.pool)
    print(f"Pool: {len(service)} puzzles ({service.source}: {service.path})")
    print(f"Date: {date_key}")
    print(f"Index: {puzzle_index(date_key, len(service))}")
    print()
    print("Answer:")
    print(f"  {puzzle.title}  [{puzzle.id}]")
    if puzzle.aliases:
        print(f"  aliases: {', '.join(puzzle.aliases)}")
    print(f"  {puzzle.total_seasons} seasons, {puzzle.total_episodes} episodes")


if __name__ == "__main__":
    main()
