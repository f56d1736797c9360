#!/usr/bin/env python3
from feeschart.plugin import plugin

plugin.run()
