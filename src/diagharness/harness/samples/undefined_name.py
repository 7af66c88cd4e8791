import os

print(x)
