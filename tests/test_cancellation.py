"""Tests for the cancellation token and interrupt routing."""

from __future__ import annotations

import os
import signal
import threading
import unittest

from luhut.cancellation import CancellationToken, listen_for_interrupt


class CancellationTokenTests(unittest.TestCase):
    def test_token_starts_active(self) -> None:
        token = CancellationToken()
        self.assertFalse(token.cancelled)
        token.cancel()
        self.assertTrue(token.cancelled)


@unittest.skipUnless(os.name == "posix", "signal delivery test requires POSIX")
class InterruptRoutingTests(unittest.TestCase):
    def test_sigint_cancels_token_and_handler_is_restored(self) -> None:
        previous = signal.getsignal(signal.SIGINT)
        with listen_for_interrupt(CancellationToken()) as token:
            os.kill(os.getpid(), signal.SIGINT)
            self.assertTrue(token.cancelled)
        self.assertIs(signal.getsignal(signal.SIGINT), previous)

    def test_worker_threads_get_token_without_handlers(self) -> None:
        results: list[bool] = []
        previous = signal.getsignal(signal.SIGINT)

        def _worker() -> None:
            with listen_for_interrupt(CancellationToken()) as token:
                results.append(signal.getsignal(signal.SIGINT) is previous)
                token.cancel()
                results.append(token.cancelled)

        thread = threading.Thread(target=_worker)
        thread.start()
        thread.join()
        self.assertEqual(results, [True, True])


if __name__ == "__main__":
    unittest.main()
