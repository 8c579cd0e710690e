from .led import StatusLed

__all__ = ['StatusLed']
