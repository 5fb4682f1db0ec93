import numpy as np
import pandas as pd

CONTINUOUS = ["src_bytes", "dst_bytes", "count", "srv_count",
              "serror_rate", "srv_serror_rate", "same_srv_rate"]


def make_mock_kdd(n_normal: int = 900, n_anomaly: int = 60, seed: int = 42) -> pd.DataFrame:
    """
    Small KDD-shaped frame for demos and tests.

    Normal rows are driven by three factors (traffic volume, error rate and a
    tcp/http vs udp/domain_u switch) plus small noise, so they sit close to a
    3-D subspace. Each anomaly breaks that structure: two continuous fields
    shifted by 6-10 normal standard deviations and rare protocol / service /
    flag values.
    Returns raw columns including `id` and `label` ('normal.' or an attack name).
    """
    rng = np.random.default_rng(seed)
    n = n_normal + n_anomaly

    load = rng.normal(0, 1, n)
    errors = rng.uniform(0, 1, n)
    is_udp = rng.random(n) < 0.15

    src_bytes = 300 + 80 * load + rng.normal(0, 4, n)
    count = 20 + 5 * load + rng.normal(0, 0.3, n)
    serror = 0.1 * errors + rng.normal(0, 0.002, n)
    df = pd.DataFrame({
        "duration": np.zeros(n),
        "protocol_type": np.where(is_udp, "udp", "tcp"),
        "service": np.where(is_udp, "domain_u", "http"),
        "flag": "SF",
        "src_bytes": src_bytes,
        "dst_bytes": 2 * src_bytes + rng.normal(0, 8, n),
        "count": count,
        "srv_count": count + rng.normal(0, 0.3, n),
        "serror_rate": serror,
        "srv_serror_rate": serror + rng.normal(0, 0.002, n),
        "same_srv_rate": 1 - serror + rng.normal(0, 0.002, n),
        "label": "normal.",
    })

    normal_std = df.loc[: n_normal - 1, CONTINUOUS].std()
    for i in range(n_normal, n):
        for col in rng.choice(CONTINUOUS, size=2, replace=False):
            direction = -1.0 if col == "same_srv_rate" else 1.0
            df.loc[i, col] += direction * rng.uniform(6, 10) * normal_std[col]
        df.loc[i, "protocol_type"] = rng.choice(["icmp", "tcp", "udp"])
        df.loc[i, "service"] = rng.choice(["ecr_i", "private", "telnet", "ftp_data"])
        df.loc[i, "flag"] = rng.choice(["S0", "REJ", "RSTO"])
        df.loc[i, "label"] = rng.choice(["smurf.", "neptune.", "satan.", "teardrop."])

    df = df.sample(frac=1.0, random_state=seed).reset_index(drop=True)
    df.insert(0, "id", np.arange(len(df)))
    return df
