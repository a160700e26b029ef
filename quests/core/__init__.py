"""Core quest primitives (decks, stages, attacks, quests, events and text rendering).

Kept free of terminal and turn-loop concerns so the quest engine, the game loop
and tests can all share them.
"""
