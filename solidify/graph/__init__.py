from solidify.graph.workflow import WorkflowServices, build_graph, compile_graph, run_scan_workflow

__all__ = ["WorkflowServices", "build_graph", "compile_graph", "run_scan_workflow"]
