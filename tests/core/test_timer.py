from datetime import timedelta

from vmkit.core.timer import ElapsedTimer


def test_timer_chain():
    timer = ElapsedTimer().start().end()

    assert timer.start_time is not None
    assert timer.end_time >= timer.start_time
    assert timer.elapsed == timer.end_time - timer.start_time
    assert timer.elapsed >= timedelta(0)


def test_elapsed_string_header():
    timer = ElapsedTimer().start().end()

    text = timer.elapsed_string("load")

    assert text.startswith("load: ElapsedTime:")
    assert "Started:" in text and "Ended:" in text
    assert not timer.elapsed_string().startswith("load")


def test_log_elapsed_returns_self(log_messages):
    timer = ElapsedTimer().start().end()

    assert timer.log_elapsed("step") is timer
    assert any("step: ElapsedTime:" in message for message in log_messages)


def test_end_without_start_keeps_zero():
    timer = ElapsedTimer().end()
    assert timer.elapsed == timedelta(0)
