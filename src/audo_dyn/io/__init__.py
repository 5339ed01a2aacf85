from .audio_file import AudioReadError, AudioWriteError, PcmAudio, read_audio, write_audio

__all__ = ["AudioReadError", "AudioWriteError", "PcmAudio", "read_audio", "write_audio"]
