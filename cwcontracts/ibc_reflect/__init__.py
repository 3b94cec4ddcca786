"""Receiving side of the IBC reflect protocol: one reflect account per channel."""