from .ipc import ipc_bp, dispatch, OPERATIONS

__all__ = ['ipc_bp', 'dispatch', 'OPERATIONS']
