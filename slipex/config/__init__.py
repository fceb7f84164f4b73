from .slipex_config import SlipEXConfig

__all__ = ['SlipEXConfig']
