import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
import time

import networkx as nx
import pandas as pd
import streamlit as st

from jabeja.algorithms.annealing import AnnealingScheduler
from jabeja.config import ConfigError, GraphInitColorPolicy, NodeSelectionPolicy, RunConfig
from jabeja.graph_build import build_graph
from jabeja.io_utils import ListSink, load_edge_list, load_metis_graph, report_filename
from jabeja.partitioning.initial_colors import assign_initial_colors
from jabeja.partitioning.metrics import edge_cut, summary
from jabeja.rand import RandomSource

# ---------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------
st.set_page_config(page_title="Ja-be-Ja – Graph Partitioner", layout="wide")
st.title("Ja-be-Ja – Balanced Graph Partitioning")

# ---------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------
@st.cache_data
def load_metis_cached(graph_bytes: bytes):
    return load_metis_graph(io.BytesIO(graph_bytes))

@st.cache_data
def load_edges_cached(graph_bytes: bytes):
    return load_edge_list(io.BytesIO(graph_bytes))

@st.cache_data
def build_synthetic_cached(n: int, p: float, seed: int = 42):
    G = nx.gnp_random_graph(n, p, seed=seed)
    # METIS-style 1-based ids
    return nx.relabel_nodes(G, lambda x: x + 1)

def records_frame(records) -> pd.DataFrame:
    return pd.DataFrame(
        [r.as_tuple() for r in records],
        columns=["round", "edge_cut", "swaps", "migrations"],
    ).set_index("round")

# ---------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------
st.subheader("Inputs")
mode = st.radio("Input mode", ["METIS graph", "Edge list CSV", "Synthetic"], horizontal=True)

with st.form("controls"):
    if mode == "METIS graph":
        graph_file = st.file_uploader("METIS adjacency file", type=["graph", "txt", "metis"])
        n = p = None
    elif mode == "Edge list CSV":
        graph_file = st.file_uploader("Edge list CSV (u,v)", type=["csv"])
        n = p = None
    else:
        n = st.number_input("Synthetic nodes (N)", 10, 20000, 500, step=10)
        p = st.slider("Edge probability (density)", 0.001, 0.5, 0.02)
        graph_file = None

    c1, c2, c3, c4 = st.columns(4)
    num_partitions = c1.number_input("Partitions", 1, 64, 4)
    rounds = c2.number_input("Rounds", 1, 100_000, 1000, 100)
    seed = c3.number_input("Seed", 0, 2**31 - 1, 0)
    alpha = c4.number_input("Alpha (cost exponent)", 0.0, 10.0, 2.0, 0.1)

    c5, c6, c7, c8 = st.columns(4)
    init_policy = c5.selectbox("Initial colors", [c.name for c in GraphInitColorPolicy])
    selection = c6.selectbox("Node selection", [c.name for c in NodeSelectionPolicy], index=2)
    rnss = c7.number_input("Neighbor sample size", 1, 100, 3)
    urss = c8.number_input("Random sample size", 1, 100, 6)

    enhanced = st.checkbox("Enhanced (exponential) annealing")
    with st.expander("Annealing settings", expanded=True):
        colA, colB, colC = st.columns(3)
        temperature = colA.number_input("Initial temperature (T)", 1.0, 10.0, 2.0, 0.1)
        delta = colB.number_input("Cooling step (delta)", 0.0, 1.0, 0.003, 0.001, format="%.4f")
        restart = colC.checkbox("Reheat when frozen")
        colD, colE, colF, colG, colH = st.columns(5)
        restart_interval = colD.number_input("Reheat after (frozen rounds)", 1, 10_000, 100)
        temp_enh = colE.number_input("Enhanced T0", 0.0001, 100.0, 1.0, 0.1)
        min_temp_enh = colF.number_input("Enhanced T min", 0.0, 1.0, 1e-5, format="%.6f")
        alpha_enh = colG.number_input("Enhanced cooling factor", 0.01, 1.0, 0.9, 0.01)
        iter_enh = colH.number_input("Cool every (rounds)", 1, 10_000, 1)

    submitted = st.form_submit_button("Run Ja-be-Ja")

# ---------------------------------------------------------------------
# Run on Submit
# ---------------------------------------------------------------------
if submitted:
    t_total0 = time.perf_counter()

    if mode == "METIS graph":
        if graph_file is None:
            st.error("Please upload a METIS graph file.")
            st.stop()
        G = load_metis_cached(graph_file.getvalue())
        graph_name = graph_file.name
    elif mode == "Edge list CSV":
        if graph_file is None:
            st.error("Please upload an edge list CSV.")
            st.stop()
        G = load_edges_cached(graph_file.getvalue())
        graph_name = graph_file.name
    else:
        G = build_synthetic_cached(int(n), float(p))
        graph_name = f"gnp_{int(n)}_{float(p)}"

    try:
        config = RunConfig.from_dict({
            "numPartitions": num_partitions,
            "rounds": rounds,
            "randomNeighborSampleSize": rnss,
            "temperature": temperature,
            "delta": delta,
            "seed": seed,
            "uniformRandomSampleSize": urss,
            "graphFilePath": graph_name,
            "outputDir": os.path.join(os.getcwd(), "output"),
            "initColorPolicy": init_policy,
            "nodeSelectionPolicy": selection,
            "alpha": alpha,
            "restart": restart,
            "restartInterval": restart_interval,
            "enhanced": enhanced,
            "tempEnh": temp_enh,
            "minTempEnh": min_temp_enh,
            "alphaEnh": alpha_enh,
            "iterEnh": iter_enh,
        })
    except ConfigError as exc:
        st.error(str(exc))
        st.stop()

    rng = RandomSource(config.seed)
    colors = assign_initial_colors(G, config.num_partitions, config.init_color_policy, rng)
    graph = build_graph(G, colors)
    initial_cut = edge_cut(graph)

    sink = ListSink()
    try:
        scheduler = AnnealingScheduler(graph, config, rng=rng, sink=sink)
    except ValueError as exc:
        st.error(str(exc))
        st.stop()

    t_algo0 = time.perf_counter()
    with st.spinner("Partitioning ..."):
        records = scheduler.run()
    t_algo1 = time.perf_counter()

    summary_text = summary(graph, records, initial_edge_cut=initial_cut)
    df = records_frame(records)

    # -----------------------------------------------------------------
    # UI Output
    # -----------------------------------------------------------------
    st.subheader("Summary")
    st.text(summary_text)
    st.caption(f"Partitioning time: {t_algo1 - t_algo0:.3f}s · Total time: {time.perf_counter() - t_total0:.3f}s")

    st.subheader("Edge cut per round")
    st.line_chart(df[["edge_cut"]])
    st.subheader("Swaps and migrations")
    st.line_chart(df[["swaps", "migrations"]])

    st.download_button(
        "Download round report (CSV)",
        df.to_csv(),
        file_name=report_filename(config).replace(".txt", ".csv"),
        mime="text/csv",
    )
    colors_df = pd.DataFrame(
        [(node.id, node.init_color, node.color) for node in graph],
        columns=["node", "init_color", "color"],
    )
    st.download_button("Download partition.csv", colors_df.to_csv(index=False),
                       file_name="partition.csv", mime="text/csv")
    st.success("Partitioning complete.")
