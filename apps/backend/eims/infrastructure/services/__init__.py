from .otp_sender import LoggingOtpSender

__all__ = ["LoggingOtpSender"]
