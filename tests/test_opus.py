from datetime import timedelta

from mediacodecs.opus import packet_duration, packet_duration_samples


def test_packet_duration():
    assert packet_duration(bytes([1])) == timedelta(milliseconds=20)


def test_packet_duration_samples_matches_duration():
    samples = packet_duration_samples(bytes([1]))
    assert timedelta(seconds=samples / 48000) == timedelta(milliseconds=20)


def test_empty_packet():
    assert packet_duration_samples(b"") == 0
    assert packet_duration(b"") == timedelta(0)


def test_code_three_without_count_byte():
    assert packet_duration_samples(bytes([3])) == 0


def test_code_three_scales_with_frame_count():
    one = packet_duration_samples(bytes([3, 1]))
    five = packet_duration_samples(bytes([3, 5]))
    assert five == 5 * one