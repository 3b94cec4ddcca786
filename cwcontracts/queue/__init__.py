"""A FIFO queue of integers kept in contract storage."""