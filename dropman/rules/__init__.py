"""
Dropman rule engines — pure, stateless, side-effect free.

Every function here reads its arguments and returns a fresh result:
no ORM access, no I/O, safe to call from any thread or coroutine.

    from dropman.rules import stock, same_day, tickets
"""
