"""
my_presenter.py — A scripted presenter and bot
===============================================

Shows how to drive the SessionController without the terminal runner:
a Presenter subclass that prints one line per state change, and a tiny
tit-for-tat bot that plays a full match through the IntentRouter.

    python my_presenter.py
"""

import asyncio

from dilemma_client import (
    Choice,
    IntentRouter,
    MatchServiceClient,
    Presenter,
    Screen,
    SelectOpponent,
    SessionController,
    ShowOpponents,
    ShowRules,
    StartMatch,
    SubmitChoice,
)


class OneLinePresenter(Presenter):
    """Print a single status line for every snapshot."""

    def render(self, snapshot):
        match = snapshot.match
        print(
            f"[{snapshot.screen.value:<14}] round {match.current_round} "
            f"score {match.player_score}-{match.opponent_score}"
        )
        if snapshot.summary is not None:
            print(f"  result: {snapshot.summary.result.value}")

    def notify(self, message):
        print(f"  !! {message}")


async def play(base_url: str = "http://localhost:8080/api") -> None:
    async with MatchServiceClient(base_url) as client:
        controller = SessionController(client, OneLinePresenter())
        router = IntentRouter(controller)

        catalog = await controller.load_catalog()
        if not catalog:
            return

        await router.dispatch(ShowRules())
        await router.dispatch(ShowOpponents())
        await router.dispatch(SelectOpponent(catalog[0].id))
        await router.dispatch(StartMatch())

        # Tit for tat: cooperate first, then copy the opponent
        move = Choice.COOPERATE
        while controller.screen in (Screen.PLAYING, Screen.ROUND_RESOLVED):
            result = await router.dispatch(SubmitChoice(move))
            if result is None:
                break
            move = result.opponent_choice

        await controller.wait_for_pending()


if __name__ == "__main__":
    asyncio.run(play())
