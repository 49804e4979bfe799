# Project configuration: settings, root URLconf and server entry points.
