from solind.clients.rpc import RPC

__all__ = ["RPC"]
