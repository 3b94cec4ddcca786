"""Message and state types for the sending side of the IBC reflect protocol."""