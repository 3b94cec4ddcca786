"""Contract that forwards raw and smart queries to a queue contract."""