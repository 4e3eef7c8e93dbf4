import asyncio

from chronicler import chronicle


@chronicle.listen(min_level="warn")
def on_trouble(event):
    """Print every warning and error once the loop gets to it."""
    print(f"listener saw {event.key} at level {event.level.name}")


async def load_page():
    chronicle.log("page:start", {"url": "/upload"})
    await asyncio.sleep(0.05)
    chronicle.log("page:fetched", {"bytes": 5 * 1024 * 1024})
    await asyncio.sleep(0.02)
    chronicle.warn("page:slow-render", "render took longer than expected")
    await asyncio.sleep(0.01)
    chronicle.log("page:done")

    # Same id twice: stored anyway, plus a diagnostic error
    chronicle.log("page:done")

    print("start to done:", chronicle.get_difference("page:done", "page:start"))
    chronicle.show_group("page")

    # Let the listeners run
    await asyncio.sleep(0)


if __name__ == "__main__":
    asyncio.run(load_page())
