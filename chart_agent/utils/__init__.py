from .error_handling import handle_error, validate_message

__all__ = ['handle_error', 'validate_message']
