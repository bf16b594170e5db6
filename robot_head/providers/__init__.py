from .contracts import LanguageModel, SpeechToText, TextToSpeech, SynthesizedAudio

__all__ = ["LanguageModel", "SpeechToText", "SynthesizedAudio", "TextToSpeech"]
