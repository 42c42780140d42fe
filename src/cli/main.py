import asyncio

from packages.itinerary_core.clients import CerebrasChatTransport
from packages.itinerary_core.config import RelayConfig, log, DEFAULT_DURATION_MINUTES, DEFAULT_DAYS_COUNT
from packages.itinerary_core.errors import RelayError
from packages.itinerary_core.llm_prompts import TRAVEL_SYSTEM_PROMPT, build_itinerary_prompt
from packages.itinerary_core.models import ItineraryPlan
from packages.itinerary_core.relay import ItineraryRelay, read_itinerary
from packages.itinerary_core.utils import positive_int


def format_itinerary(plan: ItineraryPlan) -> str:
    if not plan.dias:
        return "The model returned an empty itinerary."
    blocks = []
    for day in plan.dias:
        lines = [f"Day {day.dia}: {day.titulo}" if day.titulo else f"Day {day.dia}"]
        if day.historia:
            lines.append(day.historia)
        lines.extend(f"  {n}. {stop}" for n, stop in enumerate(day.paradas, start=1))
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


async def ask(question: str) -> str:
    answer = await asyncio.to_thread(input, question)
    return answer.strip()


async def interactive_planner(relay: ItineraryRelay):
    """Command-line loop that asks for travel preferences and prints the itinerary."""
    log.info("Itinerary planner is ready. Leave the location empty to quit.")

    while True:
        location = await ask("\nWhere are you going? ")
        if not location or location.lower() in ("exit", "quit"):
            break

        interest = await ask("What are you interested in? ")
        start = await ask("Exact starting point (optional): ") or location
        circular = (await ask("Circular route? [y/N] ")).lower().startswith("y")
        minutes = positive_int(await ask(f"Minutes per day [{DEFAULT_DURATION_MINUTES}]: "), DEFAULT_DURATION_MINUTES)
        days = positive_int(await ask(f"Number of days [{DEFAULT_DAYS_COUNT}]: "), DEFAULT_DAYS_COUNT)

        prompt = build_itinerary_prompt(location, interest, start, circular, minutes, days)
        try:
            body = await relay.forward(TRAVEL_SYSTEM_PROMPT, prompt)
            plan = read_itinerary(body)
        except RelayError as e:
            log.error("Could not build the itinerary: %s", e.message)
            if e.details:
                print(e.details)
            continue
        except Exception as e:
            log.exception("An error occurred while calling the provider: %s", e)
            print("Sorry, an error occurred. Please try again.")
            continue

        print(f"\n=== Itinerary ===\n{format_itinerary(plan)}\n=================")


async def main():
    config = RelayConfig.from_env()
    transport = CerebrasChatTransport(config)
    try:
        await interactive_planner(ItineraryRelay(config, transport))
    finally:
        await transport.aclose()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("\nExiting gracefully.")


if __name__ == "__main__":
    run()
