class CancellationToken:
    """Flag checked before an operation applies its result."""

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class TokenSource:
    """Issues tokens and cancels the ones still outstanding."""

    def __init__(self):
        self._tokens = []

    def issue(self, supersede=False) -> CancellationToken:
        if supersede:
            self.cancel_all()
        self._tokens = [token for token in self._tokens if not token.cancelled]
        token = CancellationToken()
        self._tokens.append(token)
        return token

    def release(self, token: CancellationToken):
        if token in self._tokens:
            self._tokens.remove(token)

    def cancel_all(self):
        for token in self._tokens:
            token.cancel()
        self._tokens = []
