from __future__ import annotations

def run_percent_mt_ribo(*, h5ad_abs, out_h5ad, assay, organism, gene_nomenclature,
                        reference_dir, min_version, add_counts):
    from .adata_utils import read_h5ad, write_h5ad  # import late
    from .qc.run import add_percent_mt_ribo
    adata = read_h5ad(h5ad_abs)
    adata = add_percent_mt_ribo(
        adata,
        assay=assay,
        organism=organism,
        gene_nomenclature=gene_nomenclature,
        reference_dir=reference_dir,
        min_version=(None if str(min_version).lower() in {"", "none"} else str(min_version)),
    )
    if add_counts:
        from .qc.counts import add_transcript_counts
        add_transcript_counts(adata, assay=assay)
    write_h5ad(adata, out_h5ad)
    return adata

def run_summary(*, adata, label):
    from .dashboard.session import DashboardSession  # import late
    session = DashboardSession()
    session.set_data_set(adata, label=label)
    return session.summary()
