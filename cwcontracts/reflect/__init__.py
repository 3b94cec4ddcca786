"""Messages, stored state and test dependencies of the reflect contract."""