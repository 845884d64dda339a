from .address import ListenAddress, parse_listen_address, split_host_port

__all__ = ["ListenAddress", "parse_listen_address", "split_host_port"]
