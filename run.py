# run.py

import argparse

from dotenv import load_dotenv

load_dotenv()

from rich import print
from rich.prompt import Prompt

from ai import gemini
from core.config import load_settings
from core.dates import format_local_date
from core.display import badge_for, day_display_date, split_time, trip_title
from core.errors import GenerationError, TripInputError
from core.logging_config import setup_logging
from core.models import TRANSPORT_CHOICES, ChatMessage, Language, TravelStyle
from core.validation import audit_plan, validate_request
from services import workbook


def main():
    p = argparse.ArgumentParser(description="Generate a travel itinerary with Gemini.")
    p.add_argument("--origin", required=True)
    p.add_argument("--city", "--dest", dest="destination", required=True)
    p.add_argument("--start", required=True)  # YYYY-MM-DD
    p.add_argument("--end", required=True)
    p.add_argument("--style", choices=[s.value for s in TravelStyle], default=TravelStyle.STANDARD.value)
    p.add_argument("--transport", default=TRANSPORT_CHOICES[0])
    p.add_argument("--prefs", default="", help="free-text special requests")
    p.add_argument("--lang", choices=[lang.value for lang in Language], default=Language.ZH_TW.value)
    p.add_argument("--xlsx", action="store_true", help="also export the plan as XLSX")
    p.add_argument("--chat", action="store_true", help="chat about the plan afterwards")
    args = p.parse_args()

    settings = load_settings()
    setup_logging(settings.log_level)

    try:
        req = validate_request(
            origin=args.origin,
            destination=args.destination,
            start=args.start,
            end=args.end,
            style=args.style,
            transport_mode=args.transport,
            custom_preferences=args.prefs,
            language=args.lang,
        )
    except TripInputError as e:
        p.error(str(e))

    print("[cyan]→ Itinerary…[/]")
    try:
        plan = gemini.generate_itinerary(req, model=gemini.get_model(settings))
    except GenerationError as e:
        print(f"[red]{e}[/]")
        raise SystemExit(1)

    print(f"\n[bold]{trip_title(plan)}[/]  {plan.summary}")
    if plan.total_budget_estimate:
        print(f"Budget : {plan.total_budget_estimate}")

    for d in plan.days:
        day = day_display_date(d, plan)
        print(f"\n[yellow]Day {d.day_number}  {format_local_date(day)}[/]  [bold]{d.title}[/]")
        for a in d.activities:
            clock, meridiem = split_time(a.time)
            badge = badge_for(a)
            if a.travel_time_from_previous:
                print(f"   [dim]↓ {a.travel_time_from_previous}  {a.travel_advice}[/]")
            print(f"  {clock} {meridiem}  {badge.icon} {a.activity}  [dim]{a.location}[/]")
            for r in a.restaurant_options:
                print(f"      🍴 {r.name} {r.rating}★  {r.price}  ({r.must_try})")

    print("\n[bold]Accommodations[/]")
    for acc in plan.accommodations:
        print(f"  🛏️  {acc.name} – {acc.price_per_night} – {acc.rating}★  [dim]{acc.reason}[/]")

    issues = audit_plan(plan)
    if issues:
        print(f"\n[dim]{len(issues)} rule violation(s) in Gemini's answer (see log).[/]")

    if args.xlsx:
        path = workbook.generate_workbook(plan, settings.export_dir)
        print(f"\n[green]XLSX : {path}[/]")

    if args.chat:
        model = gemini.get_model(settings)
        history: list[ChatMessage] = []
        print("\n[cyan]Chat (empty line to quit)[/]")
        while True:
            question = Prompt.ask("[bold]you[/]", default="", show_default=False).strip()
            if not question:
                break
            reply = gemini.chat_with_agent(plan, history, question, req.language, model=model)
            history += [ChatMessage("user", question), ChatMessage("model", reply)]
            print(f"[magenta]agent[/] {reply}")


if __name__ == "__main__":
    main()
