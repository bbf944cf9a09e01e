class ScoreboardError(Exception):
    pass


class InvalidEventError(ScoreboardError, ValueError):
    pass


class StateLoadError(ScoreboardError):
    pass


class SpeechError(ScoreboardError):
    pass


class SpeechCanceled(SpeechError):
    """Raised by a speech backend when an utterance was interrupted."""
    pass
