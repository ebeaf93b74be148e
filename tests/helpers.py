def play(engine, bracket, match, slot1_wins=True, winning=7, losing=3):
    """Record a result for ``match`` and return the new bracket."""
    if slot1_wins:
        return engine.apply_result(bracket, match.id, winning, losing)
    return engine.apply_result(bracket, match.id, losing, winning)


def play_until(engine, bracket, stop, slot1_wins=True):
    """Play ready matches in id order until ``stop(bracket)`` is true."""
    while not stop(bracket):
        ready = [m for m in bracket.matches() if m.is_ready]
        if not ready:
            break
        bracket = play(engine, bracket, ready[0], slot1_wins)
    return bracket
