import logging
import threading

logger = logging.getLogger(__name__)


class LoadState:
    def __init__(self):
        self.done = False
        self.aborted = False
        self.df = None
        self.error = None


class BackgroundLoader:
    """Runs a blocking loader off the UI thread; the UI polls `state.done`."""

    def __init__(self, loader_fn, load_state: LoadState):
        self.loader_fn = loader_fn
        self.state = load_state
        self.thread = None

    def start(self):
        self.thread = threading.Thread(target=self._load, daemon=True)
        self.thread.start()

    def _load(self):
        if self.state.aborted:
            return
        try:
            df = self.loader_fn()
        except Exception as exc:
            logger.exception("loading data failed")
            self.state.error = exc
        else:
            if not self.state.aborted:
                self.state.df = df
        finally:
            self.state.done = True

    def abort(self):
        self.state.aborted = True
