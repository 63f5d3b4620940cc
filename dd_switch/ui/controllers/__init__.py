from .switch_controller import OperationResult, SwitchController

__all__ = ["OperationResult", "SwitchController"]
