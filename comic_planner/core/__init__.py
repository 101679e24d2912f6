"""
Comic Planner Core
Model invocation, entity references, page fan-out, review/repair and the
pipeline that sequences them.
"""
