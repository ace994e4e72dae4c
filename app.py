#!/usr/bin/env python3
import streamlit as st
import os
import logging
import sys

# --- Logging Setup ---
log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log_handler_file = logging.FileHandler("app_debug.log", mode='a')  # Append mode
log_handler_file.setFormatter(log_formatter)
log_handler_stream = logging.StreamHandler()
log_handler_stream.setFormatter(log_formatter)
root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
if root_logger.hasHandlers():
    root_logger.handlers.clear()
root_logger.addHandler(log_handler_file)
root_logger.addHandler(log_handler_stream)
logger = logging.getLogger("itemset_app")
logger.setLevel(logging.INFO)
logger.info("-------------------- Application Starting --------------------")

# --- Import Project Modules ---
try:
    from apriori_miner.config import COUNTING_STRATEGIES, load_settings
    from apriori_miner.errors import AprioriError
    from apriori_miner.models.apriori import AprioriEngine
    from apriori_miner.models.itemsets import TransactionSet
    from apriori_miner.utils.data_loader import TransactionLoader, basket_summary
    from apriori_miner.utils.report import format_level
    from apriori_miner.utils.visualizations import (
        plot_level_sizes, plot_top_itemsets, plot_item_frequencies, get_img_as_base64
    )
    logger.info("Successfully imported project modules")
except Exception as e:
    logger.critical(f"CRITICAL ERROR importing modules: {e}", exc_info=True)
    st.error(f"Fatal Error: Could not import required modules. Check logs. Error: {e}")
    st.stop()


# --- Cached Resource Initialization Functions ---
@st.cache_resource
def get_loader(data_dir='data'):
    logger.info("Creating TransactionLoader instance...")
    return TransactionLoader(data_dir=data_dir, delimiter=load_settings()['delimiter'])


def load_dataset(source, uploaded_file=None, path=None, n_synthetic=1000):
    loader = get_loader()
    try:
        if source == 'Upload' and uploaded_file is not None:
            logger.info(f"Loading uploaded file {uploaded_file.name}")
            return loader.load_from_buffer(uploaded_file.getvalue())
        if source == 'File path' and path:
            return loader.read_transactions(path)
        if source == 'Synthetic':
            baskets = loader.generate_synthetic_baskets(n_transactions=n_synthetic)
            return TransactionSet.build(baskets)
        st.info("Choose a data source in the sidebar.")
        return None, None
    except AprioriError as e:
        logger.error(f"Error loading transactions: {e}", exc_info=True)
        st.error(f"Could not load transactions: {e}")
        return None, None


def run_apriori_analysis(transactions, catalog, min_support, max_length, counting, prune):
    try:
        logger.info(f"Running Apriori with min_support={min_support}, max_length={max_length}, counting={counting}")
        engine = AprioriEngine(min_support=min_support, max_length=max_length, counting=counting, prune=prune)
        with st.spinner('Mining frequent itemsets...'):
            engine.fit(transactions, catalog)
        logger.info("Apriori analysis completed")
        return engine
    except AprioriError as e:
        logger.error(f"Error running Apriori analysis: {e}", exc_info=True)
        st.error(f"Apriori analysis failed: {e}")
        return None


def render_dataset_overview(catalog, transactions):
    try:
        st.header('📦 Dataset')
        col1, col2 = st.columns(2)
        col1.metric("Transactions", f"{len(transactions):,}")
        col2.metric("Distinct Items", f"{len(catalog):,}")
        summary_df = basket_summary(catalog, transactions)
        st.dataframe(summary_df)
        fig = plot_item_frequencies(summary_df, top_n=20)
        if fig:
            st.pyplot(fig)
        logger.debug("Dataset overview rendered.")
    except Exception as e:
        logger.error(f"Error rendering dataset overview: {e}", exc_info=True)
        st.error("Dataset overview failed.")


def render_frequent_itemsets(engine):
    try:
        st.header('🛒 Frequent Itemsets (Apriori)')
        if not engine.levels_ or not engine.levels_[0].itemsets:
            st.info('No item meets the minimum support.')
            return
        fig_levels = plot_level_sizes(engine.levels_)
        if fig_levels:
            st.pyplot(fig_levels)
        results_df = engine.to_dataframe()
        for level in engine.levels_:
            with st.expander(f"Level {level.k}: {len(level.itemsets)} frequent itemsets", expanded=level.k == 1):
                st.dataframe(results_df[results_df['level'] == level.k].reset_index(drop=True))
        st.subheader('Top Itemsets by Support')
        min_length = st.slider('Minimum itemset size', 1, max(level.k for level in engine.levels_), 1)
        fig_top = plot_top_itemsets(engine.levels_, engine.catalog, top_n=15, min_length=min_length)
        if fig_top:
            img = get_img_as_base64(fig_top)
            st.markdown(f'<img src="data:image/png;base64,{img}" style="max-width:100%">', unsafe_allow_html=True)
        report = ''.join(format_level(level, engine.catalog) for level in engine.levels_)
        st.download_button('Download report', report, file_name='frequent_itemsets.txt')
        st.download_button('Download CSV', results_df.to_csv(index=False), file_name='frequent_itemsets.csv')
        logger.debug("Frequent itemsets rendered.")
    except Exception as e:
        logger.error(f"Error rendering frequent itemsets: {e}", exc_info=True)
        st.error("Frequent itemset view failed.")


# --- Main Application Logic ---
def main():
    try:
        st.set_page_config(layout="wide", page_title="Frequent Itemset Mining", initial_sidebar_state="expanded")
        logger.info("Main function started.")
        settings = load_settings()
        st.title('Frequent Itemset Mining')
        st.sidebar.title("Data")
        source = st.sidebar.radio("Source", ["Synthetic", "Upload", "File path"], key="data_source")
        uploaded_file = None
        path = None
        n_synthetic = 1000
        if source == 'Upload':
            uploaded_file = st.sidebar.file_uploader("Transactions file", type=['csv', 'txt', 'dat'])
        elif source == 'File path':
            path = st.sidebar.text_input("Path", settings['data_path'], key="data_path")
        else:
            n_synthetic = st.sidebar.number_input("Baskets", 100, 100000, 1000, 100)
        st.sidebar.title("Mining")
        min_support = st.sidebar.slider('Min Support', 0.01, 1.0, float(settings['min_support']), 0.01,
                                        format="%.2f", help="Min proportion of transactions.")
        max_length = st.sidebar.number_input('Max itemset size (0 = unlimited)', 0, 20, 0)
        counting = st.sidebar.selectbox('Counting', COUNTING_STRATEGIES,
                                        index=COUNTING_STRATEGIES.index(settings['counting']))
        prune = st.sidebar.checkbox('Prune candidates with infrequent subsets', value=True)

        catalog, transactions = load_dataset(source, uploaded_file, path, n_synthetic)
        if transactions is None:
            return
        upload_id = getattr(uploaded_file, 'file_id', uploaded_file.name) if uploaded_file is not None else None
        dataset_key = (source, upload_id, path, n_synthetic)
        if st.session_state.get('engine_key') != dataset_key:
            # results belong to a different dataset
            st.session_state.pop('engine', None)
            st.session_state.engine_key = dataset_key
        render_dataset_overview(catalog, transactions)
        if st.button('Run Apriori Analysis', key='run_apriori'):
            st.session_state.engine = run_apriori_analysis(
                transactions, catalog, min_support, max_length or None, counting, prune)
        if st.session_state.get('engine') is not None:
            render_frequent_itemsets(st.session_state.engine)
    except Exception as e:
        logger.critical(f"Critical error in main function: {e}", exc_info=True)
        st.error(f"A critical application error occurred: {e}. Check logs (`app_debug.log`).")


# --- Entry Point ---
if __name__ == "__main__":
    logger.info(f"Executing: {__file__} | Python: {sys.version.split()[0]} | WD: {os.getcwd()}")
    main()
    logger.info("-------------------- Application main() terminated --------------------")
